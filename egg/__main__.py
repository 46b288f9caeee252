from egg.main import main


main()
