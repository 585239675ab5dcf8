"""Photo Finder: look photos up by their code and browse the remote gallery."""
