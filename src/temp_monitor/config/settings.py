"""
Configuracion central del proyecto Temp Monitor.

Idea:
- Aqui van los parametros fijos del sistema (cadencia, tamano del historial, rango simulado).
- El Controller usa estos valores para construir la fuente y el historial.
- La View lee el formato de presentacion (unidad, decimales, titulo).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    # -------------------------------
    # Cadencia de lecturas
    # -------------------------------
    intervalo_ms: int = 2000         # una lectura nueva cada 2 s
    max_lecturas: int = 20           # tamano maximo del historial (las mas nuevas primero)

    # -------------------------------
    # Simulacion de temperatura
    # -------------------------------
    temp_min: int = 65               # parte entera minima (grados)
    temp_max: int = 85               # parte entera maxima (grados), se suma una fraccion [0, 1)

    # -------------------------------
    # Formato de presentacion
    # -------------------------------
    formato_hora: str = "%H:%M:%S"   # HH:mm:ss
    unidad: str = "°F"
    decimales: int = 1

    # -------------------------------
    # Vista Streamlit
    # -------------------------------
    titulo_app: str = "Temperature Dashboard"
    refresco_ui_s: float = 0.5       # cada cuanto se re-ejecuta la pagina para revisar el timer

    @property
    def intervalo_s(self) -> float:
        return self.intervalo_ms / 1000.0


# Instancia global utilizada por el resto del proyecto
SETTINGS = Settings()
