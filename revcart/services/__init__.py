"""
High-level use cases for the RevCart auth API.

Each service module orchestrates the repository and core adapters (hashing,
mail, token signing) to implement one set of business rules. Routers call
these services instead of touching the database directly.
"""
