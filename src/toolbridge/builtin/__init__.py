"""Built-in tool modules shipped with toolbridge."""
