"""Product catalog REST backend on Azure Cosmos DB and Blob Storage."""
