import os


def get_combine_path(*paths: str) -> str:
    """拼接路径，忽略空片段。"""
    parts = [p for p in paths if p]
    if not parts:
        return ""
    return os.path.join(*parts)
