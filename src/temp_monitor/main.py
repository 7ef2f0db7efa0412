"""
Entry point para ejecutar la vista Streamlit del proyecto.

Forma recomendada de ejecucion (desde la raiz del repo):
    python -m streamlit run src/temp_monitor/main.py

Alternativa equivalente:
    streamlit run src/temp_monitor/main.py

Nota:
- Este archivo vive dentro del paquete temp_monitor.
- Para que los imports funcionen incluso cuando Streamlit ejecuta el script
  sin haber instalado el paquete, se agrega la carpeta "src" al sys.path.
"""

import logging
import os
import sys


def _asegurar_src_en_syspath() -> None:
    """
    Agrega la carpeta /src al sys.path para que los imports del paquete funcionen
    al ejecutar con streamlit run.

    Estructura esperada:
      repo/
        src/
          temp_monitor/
            main.py
            view/
              vista_streamlit.py
    """
    base_dir = os.path.dirname(os.path.abspath(__file__))   # .../src/temp_monitor
    src_dir = os.path.dirname(base_dir)                     # .../src

    if src_dir not in sys.path:
        sys.path.insert(0, src_dir)


def _configurar_logging() -> None:
    # basicConfig no hace nada si ya hay handlers (Streamlit re-ejecuta este script)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    _asegurar_src_en_syspath()
    _configurar_logging()

    # Import despues de setear sys.path
    from temp_monitor.view.vista_streamlit import iniciar

    iniciar()


if __name__ == "__main__":
    if "streamlit" not in " ".join(sys.argv).lower():
        print(
            "Aviso: este archivo se recomienda ejecutar con:\n"
            "  python -m streamlit run src/temp_monitor/main.py\n"
        )

    main()
