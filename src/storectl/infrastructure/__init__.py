"""Infrastructure layer — database, repositories, and the Store."""
