"""Domain logic: statistics, standings, passwords and sessions."""
