from relbranch.cli.app import main

main()
