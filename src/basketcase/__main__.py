from basketcase.cli import main

main()
