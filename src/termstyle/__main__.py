from termstyle.cli import main

main()
