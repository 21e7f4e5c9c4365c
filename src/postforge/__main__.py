from postforge.app import main

main()
