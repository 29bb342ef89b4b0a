"""NiceGUI front end for the prompt evaluator."""
