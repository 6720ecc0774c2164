"""
Entry point for running WorkflowKit CLI as a module.

Usage: python -m workflowkit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
