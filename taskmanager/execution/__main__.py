from taskmanager.execution.cli import main

main()
