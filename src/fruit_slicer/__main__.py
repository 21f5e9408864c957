from fruit_slicer.main.main import main

if __name__ == "__main__":
    main()
