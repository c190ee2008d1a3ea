"""
密码编码
"""


class PasswordEncoder:
    """密码编码器接口"""

    def encode(self, raw_password: str) -> str:
        raise NotImplementedError

    def matches(self, raw_password: str, encoded_password: str) -> bool:
        raise NotImplementedError


class PlainTextPasswordEncoder(PasswordEncoder):
    """
    原样保存密码
    仅用于开发环境，生产环境需替换为哈希实现
    """

    def encode(self, raw_password: str) -> str:
        return raw_password

    def matches(self, raw_password: str, encoded_password: str) -> bool:
        return raw_password == encoded_password
