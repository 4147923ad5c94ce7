"""PhoneBook Application Package - CRUD REST API for phonebook entries.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
