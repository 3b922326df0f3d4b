from typing import Callable, Optional

from apps.profiles.models import ThemePreference

ThemeListener = Callable[[str], None]


class ThemeState:
    """Light/dark theme for one user.

    The effective theme is the persisted choice when there is one, otherwise
    the operating-system preference. Toggling persists the new choice; OS
    preference changes only apply while nothing is persisted. Listeners are
    called with the new theme whenever the effective theme changes.
    """

    def __init__(
        self,
        persisted: str = ThemePreference.SYSTEM,
        os_prefers_dark: bool = False,
        persist: Optional[Callable[[str], None]] = None,
    ):
        self.persisted = persisted or ThemePreference.SYSTEM
        self.os_prefers_dark = os_prefers_dark
        self._persist = persist
        self._listeners: list[ThemeListener] = []

    @property
    def theme(self) -> str:
        if self.persisted:
            return self.persisted
        return ThemePreference.DARK if self.os_prefers_dark else ThemePreference.LIGHT

    @property
    def follows_system(self) -> bool:
        return not self.persisted

    def subscribe(self, listener: ThemeListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def toggle(self) -> str:
        new_theme = ThemePreference.LIGHT if self.theme == ThemePreference.DARK else ThemePreference.DARK
        self.persisted = new_theme
        if self._persist is not None:
            self._persist(new_theme)
        self._notify(new_theme)
        return new_theme

    def os_preference_changed(self, prefers_dark: bool) -> str:
        before = self.theme
        self.os_prefers_dark = prefers_dark
        if self.follows_system and self.theme != before:
            self._notify(self.theme)
        return self.theme

    def _notify(self, theme: str):
        for listener in list(self._listeners):
            listener(theme)

    def as_dict(self) -> dict:
        return {
            "theme": str(self.theme),
            "persisted": str(self.persisted),
            "follows_system": self.follows_system,
            "os_prefers_dark": self.os_prefers_dark,
        }
