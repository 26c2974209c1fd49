def check_blank(param_str) -> bool:
    """
    判断是否为空字符串
    包括：None，""，"  "

    :param param_str: the string to be checked
    :return: bool
    """
    if param_str is None:
        return True
    return param_str == "" or param_str.strip() == ""


def explode(data: str, symbol: str = ","):
    """
    逗号分隔（默认逗号），去掉空白项
    "a@x.com, b@y.com," -> ["a@x.com", "b@y.com"]
    """
    if not data:
        return []
    return [item.strip() for item in data.split(symbol) if item.strip()]


def implode(item_list: list, symbol: str = ","):
    """
    Join items of a list by a specified symbol

    @param item_list:
    @param symbol:
    @return:
    """
    return symbol.join(str(item) for item in item_list)


def truncate(df_str, max_length):
    """
    Truncate a string to a limited length

    @param df_str: the sting to be truncated
    @param max_length: the max length to preserve
    @return: truncated string
    """
    if max_length <= 2:
        raise Exception("max_length is too small")
    return (df_str[:max_length-2] + "..") if len(df_str) > max_length else df_str


def collapse_whitespace(origin_str: str) -> str:
    """
    Collapse every run of whitespace (including line breaks) into a single space,
    and trim both ends
    "Hello \\n\\n  world " -> "Hello world"

    @param origin_str:
    @return:
    """
    return " ".join(origin_str.split())
