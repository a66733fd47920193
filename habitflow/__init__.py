#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitFlow - трекер привычек
Привычки, ежедневные отметки и производная статистика

Версия: 1.0.0
"""

__version__ = "1.0.0"
