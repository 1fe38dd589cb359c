from openmt940.cli import main

main()
