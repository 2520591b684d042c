"""
Supporting services for simulated play.
"""
