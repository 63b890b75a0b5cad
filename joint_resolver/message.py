from colorama import Fore, Style


def bright(text: str) -> str:
    return Style.BRIGHT + text + Style.RESET_ALL


def dim(text: str) -> str:
    return Style.DIM + text + Style.RESET_ALL


def info(text: str) -> str:
    return Fore.BLUE + text + Style.RESET_ALL


def success(text: str) -> str:
    return Fore.GREEN + text + Style.RESET_ALL


def warning(text: str) -> str:
    return Fore.YELLOW + text + Style.RESET_ALL


def error(text: str) -> str:
    return Fore.RED + Style.BRIGHT + text + Style.RESET_ALL
