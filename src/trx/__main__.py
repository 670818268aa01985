from trx.cli.main import main

main()
