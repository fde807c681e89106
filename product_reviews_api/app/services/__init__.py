"""
Service layer.

Each service encapsulates business logic for a domain so that API
handlers stay thin and the logic can be exercised without HTTP.
"""
