"""
Labels for clarity.
"""

GuessText = str  # 4 characters, each a digit 1..6
SessionId = str  # opaque game_id issued by the server
