from is_agentic_tui.cli import main

main()
