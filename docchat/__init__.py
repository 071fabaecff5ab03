"""docchat: typed RPC API for a document-chat application."""
