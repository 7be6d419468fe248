from dupcrawl.cli import main

main()
