"""
Service de dossiers hospitaliers.

Structure :
- config.py         : paramètres (.env / variables d'environnement)
- logging_config.py : configuration du logging
- errors.py         : types d'erreur (NotFound, ConstraintViolation, ConnectionFailure)
- db.py             : engine et sessions SQLAlchemy
- schema.py         : vérification de connexion et synchronisation du schéma
- models.py         : patients, médecins, rendez-vous, consultations
- auth_models.py    : utilisateurs et rôles (données inertes)
- repositories.py   : accès persistance, un repository par entité
- services.py       : façade d'écriture
- seed.py           : données de démonstration au démarrage
- bootstrap.py      : câblage des composants
- api_main.py       : processus hôte FastAPI (aucun endpoint)
- cli.py            : ligne de commande
"""
