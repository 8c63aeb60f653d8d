"""Application services layer (dashboard assembly, refresh scheduling).

Services coordinate work across domains and infrastructure. They should avoid
UI concerns.
"""
