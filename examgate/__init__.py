"""Access-gated test service: content store, grading and retrying client."""
