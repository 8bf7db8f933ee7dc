# backend/modules/timers/__init__.py

"""
Weekly pickup and shipping slots and their availability.
"""
