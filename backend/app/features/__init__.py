"""
Feature modules for Segment Scout.

Each feature is a self-contained module:
- difficulty - KOM difficulty model (pure, no I/O)
- strava     - Strava OAuth and API client
- segments   - viewport loading, caching and presentation
"""
