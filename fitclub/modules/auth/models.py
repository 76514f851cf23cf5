# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - Identity creation (auth.users table)
# - Password sign-in and session management
# - JWT token generation and validation
# - Password hashing and reset emails

"""
Supabase Auth calls used here:
- auth.admin.create_user() - Create a pre-confirmed identity at sign-up (service role)
- auth.admin.delete_user() - Roll back an identity whose profile write failed
- auth.sign_in_with_password() - Issue a session token (anon-key client)
- auth.admin.sign_out() - Revoke the caller's sessions
- auth.reset_password_for_email() - Send a password reset email

Each identity gets a companion row in user_profiles (see modules/users/models.py).
"""
