from .gemini import GeminiGateway, GeminiLiveGateway

__all__ = ["GeminiGateway", "GeminiLiveGateway"]
