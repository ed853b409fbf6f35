from lre_tools.cli.main import main

main()
