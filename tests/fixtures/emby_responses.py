"""
Reponses simulees de l'API Emby/Jellyfin pour les tests.

Format {"Items": [...]} partage par les deux serveurs.
Utilisees avec respx pour simuler les appels httpx.
"""

# GET /Users
EMBY_USERS_RESPONSE = [
    {"Name": "admin", "Id": "u-42", "HasPassword": True},
    {"Name": "guest", "Id": "u-43", "HasPassword": False},
]

# GET /Users/u-42/Items?searchTerm=Matrix
EMBY_MATRIX_RESPONSE = {
    "Items": [
        {
            "Name": "Matrix",
            "Id": "5001",
            "ProductionYear": 1999,
            "Type": "Movie",
            "ProviderIds": {"Imdb": "tt0133093"},
        },
        {
            "Name": "Matrix Reloaded",
            "Id": "5002",
            "ProductionYear": 2003,
            "Type": "Movie",
        },
    ],
    "TotalRecordCount": 2,
}

# GET /Users/u-42/Items?searchTerm=Inception
EMBY_INCEPTION_RESPONSE = {
    "Items": [
        {"Name": "Inception", "Id": "7001", "ProductionYear": 2010, "Type": "Movie"},
    ],
    "TotalRecordCount": 1,
}

EMBY_EMPTY_RESPONSE = {"Items": [], "TotalRecordCount": 0}

# GET /System/Info (Jellyfin)
JELLYFIN_SYSTEM_INFO_RESPONSE = {
    "ServerName": "jellyfin-home",
    "Version": "10.8.13",
    "Id": "b7f1c6",
}

# GET /Items?SearchTerm=Heat (Jellyfin)
JELLYFIN_HEAT_RESPONSE = {
    "Items": [
        {"Name": "Heat", "Id": "jf-1", "ProductionYear": 1995, "Type": "Movie"},
        {"Name": "Heat", "Id": "jf-2", "ProductionYear": 2013, "Type": "Movie"},
    ],
    "TotalRecordCount": 2,
}
