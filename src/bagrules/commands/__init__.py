"""Click plumbing shared by the bagrules command: options and context."""
