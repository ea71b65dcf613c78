#!/usr/bin/env python3
"""
Live Rock/Paper/Scissors - Main Runner Script

Quick launcher for the live webcam demo.

Requirements:
- Trained model must exist: models/rps_model.pth (python -m rps_dl.training.train)
- Camera connected and accessible

Usage:
    python run_live_rps.py [--model models/rps_model.pth] [--data-dir data/rps]

Controls in live mode:
- W: Launch / turn off webcam
- 1/2/3: Add Rock/Paper/Scissors sample
- T: Train with new samples
- E: Evaluate
- Q: Quit
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

# Import and run
from rps_cam.live_rps import main

if __name__ == "__main__":
    print("🚀 Launching Live Rock/Paper/Scissors...")
    print("📋 Controls: W=Webcam | 1/2/3=Add sample | T=Train | E=Evaluate | Q=Quit")
    print("=" * 50)
    main()
