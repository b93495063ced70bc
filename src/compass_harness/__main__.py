from compass_harness.cli import main

main()
