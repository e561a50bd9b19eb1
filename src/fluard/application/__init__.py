"""Application layer: ports and use cases for sending one test event."""
