"""Rotating health tips shown while the user is on the start screen."""

import asyncio
import logging
from typing import Callable, Iterator, Optional, Sequence

from nutriscan.config import settings
from nutriscan.models.language import Language

logger = logging.getLogger(__name__)

HEALTH_TIPS = {
    Language.SPANISH: [
        "Bebe al menos 8 vasos de agua al día para mantenerte hidratado.",
        "Incluye verduras de diferentes colores en tus comidas para obtener más nutrientes.",
        "Prefiere los cereales integrales sobre los refinados.",
        "Come despacio: tu cerebro tarda unos 20 minutos en registrar la saciedad.",
        "Limita los azúcares añadidos y las bebidas azucaradas.",
        "Las legumbres son una excelente fuente de proteína y fibra.",
        "Un puñado de frutos secos al día aporta grasas saludables.",
    ],
    Language.ENGLISH: [
        "Drink at least 8 glasses of water a day to stay hydrated.",
        "Include vegetables of different colors in your meals to get more nutrients.",
        "Choose whole grains over refined ones.",
        "Eat slowly: your brain takes about 20 minutes to register fullness.",
        "Limit added sugars and sugary drinks.",
        "Legumes are an excellent source of protein and fiber.",
        "A handful of nuts a day provides healthy fats.",
    ],
}


def tips_for(language: Language) -> list[str]:
    return list(HEALTH_TIPS[Language(language)])


class HealthTipRotator:
    """
    Restartable cyclic sequence of tips.

    Iterating yields tips forever, wrapping around after the last one.
    """

    def __init__(self, tips: Sequence[str]):
        if not tips:
            raise ValueError("HealthTipRotator needs at least one tip")
        self.tips = list(tips)
        self.index = 0

    @classmethod
    def for_language(cls, language: Language) -> "HealthTipRotator":
        return cls(tips_for(language))

    @property
    def current(self) -> str:
        return self.tips[self.index]

    def advance(self) -> str:
        self.index = (self.index + 1) % len(self.tips)
        return self.current

    def restart(self, tips: Optional[Sequence[str]] = None) -> None:
        """Go back to the first tip, optionally swapping the tip list (e.g. on language change)."""
        if tips is not None:
            if not tips:
                raise ValueError("HealthTipRotator needs at least one tip")
            self.tips = list(tips)
        self.index = 0

    def __iter__(self) -> Iterator[str]:
        while True:
            yield self.current
            self.advance()

    async def rotate(
        self, on_tip: Callable[[str], None], interval: Optional[float] = None
    ) -> None:
        """
        Publish the current tip, then the next one every `interval` seconds.

        Runs until the surrounding task is cancelled.
        """
        interval = interval if interval is not None else settings.tip_rotation_seconds
        try:
            on_tip(self.current)
            while True:
                await asyncio.sleep(interval)
                on_tip(self.advance())
        finally:
            logger.debug("Tip rotation stopped at index %d", self.index)
