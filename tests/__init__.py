"""
Tests de bola-magica.
"""
