"""
Stash Backend.

Core components:
- api: Resource gateway for links, snippets and resumes
- db: Resource store tables and sessions
- storage: Blob store for resume files
- client: Gateway client and the command palette search
"""
