from rpncalc.repl import cli_main

cli_main()
