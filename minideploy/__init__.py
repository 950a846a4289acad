"""minideploy - deploy the React + Express + MySQL stack to a local minikube cluster."""

__version__ = "0.1.0"
