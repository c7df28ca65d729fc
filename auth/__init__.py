"""
auth — User authentication module.

Provides:
  • Credential verification (bcrypt hashes, constant-time check)
  • Signed token creation & verification (HS256)
  • Profile read / update keyed by token claims
  • ``require_claims`` FastAPI guard
"""
