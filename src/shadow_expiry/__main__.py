from shadow_expiry.cli import main

if __name__ == "__main__":
    main()
