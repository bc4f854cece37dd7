"""Session subscription and stream management, and newline-framed stream I/O."""