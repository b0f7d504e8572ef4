from rp.cli.app import main

main()
