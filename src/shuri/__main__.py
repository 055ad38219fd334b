from shuri.cli import main

main()
