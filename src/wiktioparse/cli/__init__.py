"""
Command-line interface entry points for wiktioparse.

Entry points:
- wiktioparse: Parse a Wiktionary article into a JSON word record
"""
