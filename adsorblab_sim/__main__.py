# adsorblab_sim/__main__.py
"""
Enable running the package as a module: python -m adsorblab_sim

Equivalent to:
    adsorblab-sim [command] [options...]
"""

from adsorblab_sim import main

if __name__ == "__main__":
    main()
