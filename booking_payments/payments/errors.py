"""
Erreurs métier du module payments.
- ValidationError: entrée invalide côté client (ex: customer_id manquant) -> 400.
- ProcessorError: échec d'un appel Stripe, conserve le message d'origine -> 500.
"""


class ValidationError(Exception):
    def __init__(self, message: str, code: str = "invalid"):
        super().__init__(message)
        self.code = code


class ProcessorError(Exception):
    def __init__(self, message: str, operation: str = ""):
        super().__init__(message)
        self.operation = operation
