from infinigrid.run_gui import main

main()
