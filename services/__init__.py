"""
Services package for data access and external integrations.

Data access modules wrap Supabase tables and return ``Result`` values;
``supabase_auth`` and ``ai_flows`` talk to Supabase Auth and Gemini.
"""

from .store import Result, RowStore
from .supabase_auth import supabase_auth

__all__ = [
    "Result",
    "RowStore",
    "supabase_auth",
]
