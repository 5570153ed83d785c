from portfolio_analyzer.cli import main

main()
