# Supabase tables: user_profiles, auth.users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

user_profiles:
- id: uuid (primary key, references auth.users.id) - one profile per identity
- email: text (not null) - copied from auth.users at sign-up
- display_name: text (nullable)
- membership_type: text (not null, one of: basic, premium, vip)
- membership_expiry: timestamptz (not null)
- created_at: timestamptz (not null)
- updated_at: timestamptz (not null)

Note: Authentication data (password, tokens) is stored in auth.users table
managed by Supabase Auth. Profiles are never deleted by this service.
"""
