"""
auth — User authentication module.

Provides:
  • Session token issue & verification (HMAC-SHA256 signed claims)
  • Password hashing (bcrypt)
  • Register / Login service and API routes
  • ``require_session`` / ``get_current_user_id`` FastAPI dependencies
"""
