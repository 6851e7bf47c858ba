from chief_relay.main import main

main()
