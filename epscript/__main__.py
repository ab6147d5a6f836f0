from epscript.main import main


main()
