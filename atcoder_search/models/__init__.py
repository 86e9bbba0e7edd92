"""
Request, response and indexed document models.
"""
