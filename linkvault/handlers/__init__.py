from linkvault.handlers import health, redirect_url, shorten_url


__all__ = [
    'health',
    'redirect_url',
    'shorten_url',
]
