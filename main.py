from product_catalog.main import main

if __name__ == "__main__":
    main()
