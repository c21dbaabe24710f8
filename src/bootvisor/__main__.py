from bootvisor.cli.entrypoint import main

main()
