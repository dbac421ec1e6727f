from constructia.classification.base import BaseClassifier
from constructia.classification.classifier import Classifier
from constructia.classification.factory import ClassifierFactory

__all__ = ["BaseClassifier", "Classifier", "ClassifierFactory"]
