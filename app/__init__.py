"""Task Board API: personal task tracking with tags, board moves and activity trends."""
