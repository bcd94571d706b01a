"""
Service layer abstraction.

Each service encapsulates the business logic for one domain and talks
to the key-value store it is given, so API handlers stay thin.
"""
