from relbuild.cli.app import main

main()
