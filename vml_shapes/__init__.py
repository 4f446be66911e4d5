"""
Convert VML drawings embedded in Word documents into renderer-agnostic shape trees.
"""
