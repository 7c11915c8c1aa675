"""Study Planner backend"""
