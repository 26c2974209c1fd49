from urllib import parse as urllib_parse


def join_url(base_url: str, *parts) -> str:
    """
    Join a base url and path parts with exactly one slash between them

    "http://localhost:8000/api/", "protected", "emails" -> "http://localhost:8000/api/protected/emails"

    :param base_url: scheme and host, optionally with a path prefix
    :param parts: path segments, each is url-quoted
    :return: joined url
    """
    url = base_url.rstrip('/')
    for part in parts:
        segment = urllib_parse.quote(str(part).strip('/'), safe='/')
        if segment:
            url = f"{url}/{segment}"
    return url


def url_encode(url: str):
    """
    Encode URL
    @param url:
    @return:
    """
    return urllib_parse.quote(url)


def url_decode(url: str):
    """
    Decode URL
    @param url:
    @return:
    """
    return urllib_parse.unquote(url)
