from tagwalk.cli import main

main()
