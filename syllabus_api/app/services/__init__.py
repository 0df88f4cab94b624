"""
Service layer abstraction.

Each service encapsulates the lookup logic for a domain and is handed
its ``Database`` explicitly, so API handlers never touch SQL.
"""
