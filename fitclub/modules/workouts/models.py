# Supabase table: workouts
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key, default: gen_random_uuid())
- user_id: uuid (foreign key to user_profiles.id, not null) - owner, set on insert only
- name: text (not null)
- type: text (not null)
- duration: integer (not null, check duration > 0) - minutes
- calories: integer (nullable)
- notes: text (default: '')
- created_at: timestamptz (not null)
- updated_at: timestamptz (nullable)
- index on (user_id, created_at desc)
"""
