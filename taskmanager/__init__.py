"""Task management domain: work items, collaborators and the status dispatcher."""
