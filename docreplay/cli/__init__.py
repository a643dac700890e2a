"""
docreplay CLI - Document event replay

Commands:
- docreplay replay - Replay events against a base document
- docreplay inspect - List the instructions of event files
- docreplay version - Show version information
"""
