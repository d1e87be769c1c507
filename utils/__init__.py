"""Library Ledger - CLI Utilities Package

- Output rendering for list/stats results (ui_helpers.py)
- Input validation for free-text fields (validators.py)
"""
