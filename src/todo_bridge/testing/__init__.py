"""Testing – in-memory fakes for the backend, the broker and the clock."""
