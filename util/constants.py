class InternalURIs:
    API = "/api"
    V1 = API + "/v1"
    USERNAME = V1 + "/username"
    USERNAME_CHECK = USERNAME + "/check"
    ADMIN = V1 + "/admin"
    USERNAME_CACHE = ADMIN + "/username-cache"
    USERNAME_CACHE_RESEED = USERNAME_CACHE + "/reseed"
