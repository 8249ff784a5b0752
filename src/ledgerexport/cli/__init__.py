"""
Command Line Interface Package

Command Structure:
- ledgerexport: Main entry point with utility commands (version, config)
- ledgerexport export: Render the Beancount ledger from Actual data
- ledgerexport sync: Save Actual data to a local cache directory
- ledgerexport validate-mappings: Check the mapping file against Actual data
"""
