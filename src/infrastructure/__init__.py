"""Infrastructure layer (persistence and other IO).

Nothing here should know about the UI; domain code receives these objects
through the interfaces they implement.
"""
