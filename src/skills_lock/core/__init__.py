"""Core building blocks: tree traversal, tagged JSON loading, and the lockfile."""
