from devconnector import main

main()
