"""
Service layer abstraction.

Each service encapsulates business logic for a domain and receives the
store handle explicitly, so API handlers never touch SQL directly.
"""
