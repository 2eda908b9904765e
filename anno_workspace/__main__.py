from anno_workspace.cli import main

main()
