# main.py
from scramble_sim.__main__ import main

if __name__ == "__main__":
    main()
