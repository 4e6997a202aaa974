from models.structures import GapStatus, OkiOutcome


def generate_insights(results):
    """
    Recebe o dicionário produzido por `main.run` (chaves 'advantage', 'followups',
    'oki_timeline', 'oki', 'loop_throws', 'trade') e gera uma lista de insights
    e recomendações acionáveis.
    """

    insights = []

    if not results:
        insights.append("Nenhum cálculo disponível para gerar recomendações.")
        return insights

    advantage = results.get("advantage") or {}
    if advantage:
        if not advantage.get("valid"):
            insights.append(f"Cálculo de vantagem inválido: {advantage.get('error') or 'dados incompletos'}.")
        else:
            status = advantage.get("status")
            gap = advantage.get("gap", 0)
            if status == GapStatus.HIGH_RISK:
                insights.append(f"Gap de {gap}F entre os golpes: sequência arriscada, prefira um golpe mais rápido ou um cancel.")
            elif status == GapStatus.INTERRUPTIBLE:
                insights.append(f"Gap de {gap}F: o oponente pode apertar um normal rápido; use como isca apenas contra quem espera.")
            elif status == GapStatus.FRAME_TRAP:
                insights.append(f"Frame trap de {gap}F: normais do oponente tomam counter hit, só reversal invencível escapa.")
            elif status == GapStatus.TRUE_BLOCKSTRING:
                insights.append("Blockstring real: o oponente fica travado no bloqueio entre os golpes.")
            elif status == GapStatus.NO_COMBO:
                insights.append(f"O combo não conecta por {abs(gap)}F; procure uma continuação mais rápida ou um cancel.")
            elif status == GapStatus.COMBO and gap <= 1:
                insights.append(f"Link de {gap + 1}F de janela: execução apertada, treine o timing.")

    followups = results.get("followups") or []
    if followups:
        names = ", ".join(f["move"]["name"] for f in followups[:3])
        insights.append(f"Melhores continuações: {names}.")

    timeline = results.get("oki_timeline") or {}
    outcome = timeline.get("classification")
    if outcome == OkiOutcome.TOO_EARLY:
        insights.append("O golpe do oki termina antes do oponente levantar; adicione espera ou um dash.")
    elif outcome == OkiOutcome.TOO_LATE:
        insights.append("O golpe do oki chega depois do reversal do oponente; encurte a preparação.")
    elif outcome == OkiOutcome.TRADE:
        insights.append("O oki troca com o reversal mais rápido do oponente.")

    oki = results.get("oki") or []
    meaty = [m for m in oki if m.get("is_meaty")]
    if meaty:
        insights.append(f"{len(meaty)} opções de meaty encontradas; comece por {meaty[0]['move']['name']}.")
    elif "oki" in results and not oki:
        insights.append("Nenhuma opção de oki acerta a janela do oponente após esse knockdown.")

    if "loop_throws" in results and not results.get("loop_throws"):
        insights.append("Sem loop de throw possível nesse knockdown.")

    trade = results.get("trade") or {}
    if trade:
        adv = trade.get("advantage", 0)
        if adv > 0:
            insights.append(f"Em trade o golpe A fica +{adv}F.")
        elif adv < 0:
            insights.append(f"Em trade o golpe A fica {adv}F; evite trocar com esse golpe.")

    if not insights:
        insights.append("Nenhuma observação relevante: a sequência está consistente.")

    return insights
