from msrv.cli.app import main

main()
