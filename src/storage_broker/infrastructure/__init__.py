"""
Infrastructure layer: reusable SQL assembly services.
"""
