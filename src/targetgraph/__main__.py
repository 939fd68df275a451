from targetgraph.cli import main

main()
