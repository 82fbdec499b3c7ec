from polyprompt.cli import main

main()
