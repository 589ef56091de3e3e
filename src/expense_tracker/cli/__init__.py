"""
Command Line Interface Package

Unified CLI for the expense tracker.

Command Structure:
- expense-tracker: Main entry point with utility commands (version, config, add, stats)
- expense-tracker export / template / history / share / email: export workflows
- expense-tracker schedule / integrations: scheduled backups and simulated destinations
"""
