"""notes-bridge: run JXA and AppleScript against Apple Notes via osascript."""
