"""Peer messaging: message types, the Communication interface, subscription ids and health checks."""