"""
Entry point for running WorkflowKit CLI as a module.

Usage: python -m workflowkit [command] [options]
"""

from workflowkit.cli.parser import main

if __name__ == "__main__":
    main()
