"""
catalyst_parser — Cardano Project Catalyst registration metadata parser.

Decodes the voting-registration certificate carried in transaction
metadata and extracts the voting key, Catalyst ID, stake address,
payment address hash and voting power distribution.

Built on the Railway-Oriented Programming (ROP) Result type for
explicit, composable error handling.
"""

__version__ = "0.1.0"
