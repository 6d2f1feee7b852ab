"""DRM name normalization.

DRM tags on the tracker are user-submitted with the worst capitalization and
spelling you could imagine, if they're even correct in the first place. This
maps them onto a small set of display names. It does not try to nail every
edge case; anything it cannot place is "Unknown".
"""

from collections.abc import Iterable

import structlog

log = structlog.stdlib.get_logger()

DRM_UNKNOWN = "Unknown"
DRM_DISC_CHECK = "Disc Check"
DRM_NONE = "None"
DRM_CONSOLE = "Console"

# Lower-cased raw tag -> display name
DRM_NAME_MAPPING: dict[str, str] = {
    "": DRM_UNKNOWN,
    "-": DRM_UNKNOWN,
    "activation": DRM_UNKNOWN,
    "activision": DRM_UNKNOWN,
    "amazon": "Amazon",
    "andmicrosoftwindows": DRM_UNKNOWN,
    "arcade": DRM_UNKNOWN,
    "arcsystemworks": DRM_UNKNOWN,
    "armadillo": "Armadillo",
    "arxan": "Arxan",
    "ascgames": DRM_UNKNOWN,
    "atarisa": DRM_UNKNOWN,
    "battleeye": DRM_UNKNOWN,
    "battle.net": "Battle.net",
    "battlenet": "Battle.net",
    "battlenet-arxan": "Battle.net/Arxan",
    "bethesda": DRM_UNKNOWN,
    "bigfish": DRM_UNKNOWN,
    "blitsgames": DRM_UNKNOWN,
    "catalyst": "Catalyst",
    "cdautokey": DRM_DISC_CHECK,
    "cd-check": DRM_DISC_CHECK,
    "cdcheck": DRM_DISC_CHECK,
    "cdcheck/re-index": DRM_DISC_CHECK,
    "cd-checks": DRM_DISC_CHECK,
    "cdchecks": DRM_DISC_CHECK,
    "cd-cops": "CD-Cops",
    "cddilla": "C-Dilla",
    "cdilla": "C-Dilla",
    "cd-key": "Serial",
    "cd rom": DRM_DISC_CHECK,
    "cd-rom": DRM_DISC_CHECK,
    "codecheck": "Code Check",
    "codewheel": "Code Wheel",
    "colorcodes": "Color Codes",
    "copylock": "CopyLok",
    "copylok": "CopyLok",
    "coredesign": DRM_UNKNOWN,
    "denuvo": "Denuvo",
    "denuvo+origin": "Denuvo/Origin",
    "denuvo+uplay": "Denuvo/Uplay",
    "denuvo+vmpotect": "Denuvo/VMProtect",
    "deutschland-spielt": DRM_UNKNOWN,
    "disc check": DRM_DISC_CHECK,
    "disccheck": DRM_DISC_CHECK,
    "doccheck": DRM_UNKNOWN,  # Probably a manual lookup, not a scheme
    "dos": DRM_UNKNOWN,
    "dreamcast": DRM_CONSOLE,
    "dreamforgeintertainment": DRM_UNKNOWN,
    "drm": DRM_UNKNOWN,
    "drm free": DRM_NONE,
    "drm-free": DRM_NONE,
    "drmfree": DRM_NONE,
    "drmfreegog": DRM_NONE,
    "dvd drm": DRM_UNKNOWN,  # Could be CSS, could be anything
    "dvddrm": DRM_UNKNOWN,
    "dvd-rom": DRM_UNKNOWN,
    "eac": DRM_UNKNOWN,
    "eappx": "EAppX",
    "eidosinteractive": DRM_UNKNOWN,
    "electronicarts": DRM_UNKNOWN,
    "e-license": "eLicense",
    "epic": "Epic Games",
    "epicgames": "Epic Games",
    "false": DRM_UNKNOWN,
    "fileintegrity": "File Integrity",
    # A free game is not necessarily a DRM-free game.
    "free": DRM_UNKNOWN,
    "free2play": DRM_UNKNOWN,
    "free-to-play": DRM_UNKNOWN,
    "gamejolt": DRM_NONE,
    "games for windows": "Games for Windows Live",
    "gameshield": "GameShield",
    "gog": DRM_NONE,
    "gog.com": DRM_NONE,
    "gog/steam": DRM_NONE,
    "icantfindthisgameonanygamestoreplatform": DRM_UNKNOWN,
    "igc-dvd": DRM_UNKNOWN,
    "interactivision a/s": DRM_UNKNOWN,
    "ios/android": "Mobile",
    "ironwrap": "GameShield",
    "jowood": DRM_UNKNOWN,
    "konami": DRM_UNKNOWN,
    "laserlock": "LaserLock",
    "magnussoft": DRM_UNKNOWN,
    "microids": DRM_UNKNOWN,
    "microsoft": DRM_UNKNOWN,
    "microsoftslps": "Microsoft SLPS",
    "microsoftstore": "Microsoft Store",
    "microsoftwindows": DRM_UNKNOWN,
    "mmo": DRM_UNKNOWN,
    "moby": DRM_UNKNOWN,
    "ms-dos": DRM_UNKNOWN,
    "myswooop": DRM_UNKNOWN,
    "n/a": DRM_UNKNOWN,
    "nes": DRM_CONSOLE,
    "nintendo": DRM_CONSOLE,
    "nintendo exclusive": DRM_CONSOLE,
    "nintendoswitch": DRM_CONSOLE,
    "no-drm": DRM_NONE,
    "nodrm": DRM_NONE,
    "none": DRM_NONE,
    "nothing": DRM_NONE,
    "notspecified": DRM_UNKNOWN,
    "novalogic": DRM_UNKNOWN,
    "oculus": DRM_UNKNOWN,  # Oculus dropped its DRM; successors unclear
    "origin": "Origin",
    "patreon": DRM_UNKNOWN,
    "pc": DRM_UNKNOWN,
    "pc-dos": DRM_UNKNOWN,
    "pc-spiel": DRM_UNKNOWN,
    "play+smile": DRM_UNKNOWN,
    "playstation3/xbox360": DRM_CONSOLE,
    "playstation/ios": DRM_CONSOLE,
    "popcap": DRM_UNKNOWN,
    "protectcd": "ProtectDISC CD",
    "protectcd8": "ProtectDISC CD",
    "protectdvd": "ProtectDISC DVD",
    "reroute": DRM_UNKNOWN,
    "re-route/size": DRM_UNKNOWN,
    "retail": DRM_UNKNOWN,
    "ring": DRM_UNKNOWN,
    "rockstar": "Rockstar Social Club",
    "safedisc": "SafeDisc",
    "safedisc2": "SafeDisc v2",
    "safedisc4": "SafeDisc v4",
    "safedisk": "SafeDisc",
    "securom": "SecuROM",
    "serial": "Serial",
    "serialnumber": "Serial",
    "solidshield": "Solidshield",
    "stadia": "Google Stadia",
    "starforce": "StarForce",
    "steam": "Steam",
    "steam/arc": "Steam",
    "steam/free": "Steam",
    "steam/origin": "Steam/Origin",
    "steam+uplay": "Steam/Uplay",
    "tlgames": DRM_UNKNOWN,
    "tages": "Tagès",
    "tbd": DRM_UNKNOWN,
    "themida": "Themida",
    "ubisoft": DRM_UNKNOWN,
    "ump": DRM_UNKNOWN,
    "unknown": DRM_UNKNOWN,
    "uplay": "Uplay",
    "uplay/denuvo": "Uplay/Denuvo",
    "uwp": "UWP",
    "uwp-arxan": "UWP/Arxan",
    "uwp/steam": "UWP/Steam",
    "valeroa": "Valeroa",
    "vista": DRM_UNKNOWN,
    "vmprotect": "VMProtect",
    "vob/protectcd": "ProtectDISC CD",
    "wildgames": DRM_UNKNOWN,
    "wildtangent": "WildTangent",
    "windows": DRM_UNKNOWN,
    "xbox": DRM_CONSOLE,
    "xboxlive": DRM_CONSOLE,
    "ysiphus": DRM_UNKNOWN,
    "zagravagames": DRM_UNKNOWN,
}


class DRMNormalizer:
    """Collapses raw DRM tags into a single display string.

    Tags missing from the table are treated as unknown. Each one is logged
    the first time it shows up and remembered in ``unseen_tokens``, so the
    table can be extended by hand later.
    """

    def __init__(self, mapping: dict[str, str] | None = None) -> None:
        self._mapping: dict[str, str] = mapping if mapping is not None else DRM_NAME_MAPPING
        self._unseen: set[str] = set()

    def lookup(self, tag: str) -> str:
        """Display name for a single raw tag."""
        key = tag.lower()
        name = self._mapping.get(key)
        if name is None:
            if key not in self._unseen:
                self._unseen.add(key)
                log.info("First time coming across DRM name", drm_name=key)
            return DRM_UNKNOWN
        return name

    def normalize(self, tags: Iterable[str]) -> str:
        """Join the known display names of ``tags`` with "+".

        Order follows the input and repeats are kept. Returns "Unknown" when
        nothing recognisable is left.
        """
        names = [self.lookup(tag) for tag in tags]
        known = [name for name in names if name != DRM_UNKNOWN]
        if not known:
            return DRM_UNKNOWN
        return "+".join(known)

    def unseen_tokens(self) -> frozenset[str]:
        """Tags that were looked up but are missing from the table."""
        return frozenset(self._unseen)


_default_normalizer: DRMNormalizer | None = None


def get_drm_normalizer() -> DRMNormalizer:
    """Get the process-wide normalizer instance."""
    global _default_normalizer
    if _default_normalizer is None:
        _default_normalizer = DRMNormalizer()
    return _default_normalizer


def normalize_drm_names(tags: Iterable[str]) -> str:
    """Convenience function using the process-wide normalizer."""
    return get_drm_normalizer().normalize(tags)
