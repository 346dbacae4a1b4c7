from royalemeta.clients.royale_api import RoyaleApiClient, player_path

__all__ = ["RoyaleApiClient", "player_path"]
