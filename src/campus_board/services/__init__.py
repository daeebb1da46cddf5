"""Business logic for the feed engine, engagement and moderation."""
