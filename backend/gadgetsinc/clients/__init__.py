from gadgetsinc.clients.chat_api_client import ChatApiClient

__all__ = ["ChatApiClient"]
